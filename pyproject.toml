[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eplayout"
version = "0.1.0"
description = "Output layer of a media player: PES headers, AAC/ADTS helpers, output command dispatch and subtitle event formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["pes", "mpeg", "aac", "adts", "subtitles", "dvb", "media", "player"]
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
    "Topic :: Multimedia :: Video",
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["eplayout"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
