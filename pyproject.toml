[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "partnerdesk"
version = "0.1.0"
description = "Desktop tool for managing business partners, their sales and material requirements"
requires-python = ">=3.10"
dependencies = []
keywords = ["partners", "sales", "sqlite", "tkinter", "materials"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
partnerdesk = "partnerdesk.app:main"

[tool.setuptools.packages.find]
include = ["partnerdesk*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
