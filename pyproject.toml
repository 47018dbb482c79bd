[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "pipex"
version = "1.0.0"
description = "Run a chain of commands between an input file and an output file, like a shell pipeline"
requires-python = ">=3.10"
dependencies = []
keywords = ["pipe", "pipeline", "shell", "heredoc", "subprocess"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: System Shells",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pipex = "pipex.cli:main"
pipex-bonus = "pipex.cli:main_bonus"

[tool.setuptools]
packages = ["pipex"]

[tool.pytest.ini_options]
addopts = "-ra"
