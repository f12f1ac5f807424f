[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rawhttp"
version = "0.1.0"
description = "A minimal HTTP/1.1 client built directly on TCP sockets"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "client", "socket", "tcp", "http-parser"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rawhttp-connect = "rawhttp.connection:main"
rawhttp-send = "rawhttp.request:main"
rawhttp-fetch = "rawhttp.response:main"
rawhttp-demo = "rawhttp.client:main"

[tool.hatch.build.targets.wheel]
packages = ["rawhttp"]

[tool.pytest.ini_options]
addopts = "-ra"
