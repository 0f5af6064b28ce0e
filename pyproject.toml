[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "pixiu-samples"
version = "1.0.0"
description = "Sample backends for trying out an API gateway: in-memory user, student and teacher providers and small HTTP sample servers."
requires-python = ">=3.10"
dependencies = []
keywords = ["gateway", "api-gateway", "samples", "http", "provider", "testing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pixiu-provider = "pixiu_samples.provider_app:main"
pixiu-http-sample = "pixiu_samples.http_samples:main"

[tool.setuptools.packages.find]
include = ["pixiu_samples*"]

[tool.pytest.ini_options]
addopts = "-ra"
