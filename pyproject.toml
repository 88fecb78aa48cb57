[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "microtube"
version = "0.1.0"
description = "Video feed toolkit: resumable downloads, comment pages, categories, SponsorBlock segments and recent search history"
requires-python = ">=3.10"
dependencies = []
keywords = ["video", "downloader", "resume", "comments", "sponsorblock", "categories"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
microtube-download = "microtube.downloader:main"

[tool.hatch.build.targets.wheel]
packages = ["microtube"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
