[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sshtui"
version = "0.1.0"
description = "Terminal menus for picking an SSH host to connect to and for copying files to and from it with scp"
requires-python = ">=3.10"
dependencies = []
keywords = ["ssh", "scp", "tui", "curses", "file-manager", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: System :: Networking",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ssh-tui = "sshtui.ssh_cli:main"
scp-tui = "sshtui.scp_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sshtui"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
