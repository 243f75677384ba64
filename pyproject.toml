[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "whiteboard"
version = "0.1.0"
description = "Shared whiteboard: a gRPC server that relays lines and rectangles between connected pygame drawing clients"
requires-python = ">=3.10"
keywords = ["whiteboard", "drawing", "collaboration", "grpc", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Groupware",
    "Topic :: Multimedia :: Graphics :: Editors :: Vector-Based",
]
dependencies = [
    "grpcio",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
whiteboard-server = "whiteboard.server_manager:main"
whiteboard-client = "whiteboard.app:main"

[tool.hatch.build.targets.wheel]
packages = ["whiteboard"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
