from pathlib import Path
from setuptools import setup, find_packages

BASE_DIR = Path(__file__).parent

# ----------------------------------------------------------------------
# Core version & requirements (the library itself)
# ----------------------------------------------------------------------
version = (BASE_DIR / ".version").read_text().strip()
long_description = (BASE_DIR / "README.md").read_text(encoding="utf-8")
requirements_lib = [
    r.strip()
    for r in (BASE_DIR / "requirements_lib.txt").read_text().splitlines()
    if r.strip() and not r.strip().startswith("#")
]

# ----------------------------------------------------------------------
# Extras handling
# ----------------------------------------------------------------------
extras = {
    "test": ["pytest>=7.0"],
}

# ----------------------------------------------------------------------
setup(
    name="llm-connector",
    version=version,
    description="LLM Connector – request configuration for OpenAI chat models behind LiteLLM",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="RadLab.dev Team",
    license="Apache-2.0",
    packages=find_packages(
        where=".",
        include=[
            "llm_connector_lib*",
            "llm_connector_cli*",
        ],
        exclude=("tests", "docs"),
    ),
    python_requires=">=3.10",
    install_requires=requirements_lib,
    extras_require=extras,
    entry_points={
        "console_scripts": [
            "llm-connector-resolve=llm_connector_cli.resolve_config:main",
        ]
    },
)
