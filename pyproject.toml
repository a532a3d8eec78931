[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glyphlayout"
version = "0.1.0"
description = "Text layout: positions glyphs from sections of text using font metrics, line breaking and alignment"
requires-python = ">=3.10"
dependencies = []
keywords = ["text", "layout", "glyph", "font", "line-breaking", "typography"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Fonts",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["glyphlayout"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
