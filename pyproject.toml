[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecat_client"
version = "0.0.1"
description = "EtherCAT client data model: PDO layouts, device PDO mappings, a reference filter, PDO logging and periodic worker threads."
requires-python = ">=3.10"
dependencies = []
keywords = ["ethercat", "pdo", "robotics", "motor", "fieldbus", "filter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ecat_client"]

[tool.pytest.ini_options]
addopts = "-ra"
