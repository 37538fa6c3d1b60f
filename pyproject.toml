[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dhcpsix"
version = "0.1.0"
description = "DHCPv6 DUIDs and options: parsing, serialization and interface helpers"
requires-python = ">=3.10"
keywords = ["dhcpv6", "dhcp", "duid", "ipv6", "networking", "rfc8415"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dhcpsix"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
