[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proctext"
version = "0.1.0"
description = "Simplex noise, geodesic sky-sphere meshes and an embeddable text-editing engine with undo/redo"
requires-python = ">=3.10"
dependencies = []
keywords = ["simplex noise", "fbm", "procedural", "geosphere", "icosphere", "text editing", "undo"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Text Editors :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["proctext"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
