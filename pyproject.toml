[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procwatch"
version = "0.1.0"
description = "Collect CPU, soft-IRQ, memory and network statistics from /proc, share them over gRPC and show them in a terminal"
requires-python = ">=3.10"
keywords = ["monitoring", "proc", "cpu", "memory", "network", "grpc", "softirq"]
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
    "Topic :: System :: Monitoring",
]
dependencies = [
    "grpcio",
    "rich",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
procwatch-server = "procwatch.server:main"
procwatch-collector = "procwatch.collector:main"
procwatch-display = "procwatch.display:main"

[tool.hatch.build.targets.wheel]
packages = ["procwatch"]

[tool.pytest.ini_options]
addopts = "-ra"
