[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bareos"
version = "0.1.0"
description = "BMFS disk-image tools, a module packer and a simulated teaching kernel with console, keyboard, video, timer and a small shell"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bmfs",
    "disk image",
    "bare metal",
    "kernel",
    "module packer",
    "framebuffer",
    "shell",
    "emulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: System :: Filesystems",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bareos-bmfs = "bareos.bmfs_cli:main"
bareos-pack = "bareos.packer:main"

[tool.hatch.build.targets.wheel]
packages = ["bareos"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
