[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "amqpcore"
version = "0.1.0"
description = "Building blocks of an AMQP 0-9-1 client: topology bookkeeping, publisher confirms, returned messages and socket readiness state."
requires-python = ">=3.10"
dependencies = []
keywords = ["amqp", "rabbitmq", "messaging", "topology", "publisher-confirms"]
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
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["amqpcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
