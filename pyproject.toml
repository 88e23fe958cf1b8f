[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hostsweep"
version = "0.1.0"
description = "Ping, TCP SYN and service sweeps over IPv4 address ranges, with results stored in SQLite for later search"
requires-python = ">=3.10"
keywords = ["network", "scanner", "icmp", "port-scan", "service-detection", "banner"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "psutil",
    "requests",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hostsweep = "hostsweep.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hostsweep"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
