from pathlib import Path

from setuptools import setup

install_requires = [
    "curio>=1.4",
]


setup(
    name='discord-ipc-client',
    version='0.1.0',
    packages=['discord_ipc', 'discord_ipc.dataclasses'],
    license='LGPLv3',
    description='A Python library for the local Discord RPC socket, for Rich Presence',
    long_description=Path(__file__).with_name("README.rst").read_text(encoding="utf-8"),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3 :: Only",
        "Operating System :: POSIX",
        "Operating System :: Microsoft :: Windows",
        "Development Status :: 4 - Beta"
    ],
    install_requires=install_requires,
    extras_require={
        "test": [
            "pytest",
        ],
        "docs": [
            "sphinx_py3doc_enhanced_theme",
            "sphinx",
            "sphinx-autodoc-typehints",
        ]
    },
)
