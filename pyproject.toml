[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "k8gb"
version = "0.1.0"
description = "Gslb resource model, strategy validation and DNS endpoint computation for global server load balancing"
requires-python = ">=3.10"
dependencies = []
keywords = ["gslb", "dns", "load-balancing", "failover", "round-robin", "geoip"]
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
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["k8gb"]

[tool.pytest.ini_options]
addopts = "-ra"
