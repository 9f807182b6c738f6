# setup.py
from setuptools import setup, find_packages

setup(
    name="rill",
    version="0.1.0",
    description="A small interactive s-expression language with native functions and macros",
    packages=find_packages(include=["rill", "rill.*", "rill_lsp", "rill_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis>=6.82"],
    },
    entry_points={
        "console_scripts": [
            "rill=rill.repl:main",
            "rill-ls=rill_lsp.server:main",
        ],
    },
    zip_safe=False,
)
