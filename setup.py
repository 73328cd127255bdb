
from setuptools import setup, find_packages
setup(
    name="id_pack",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["server"],
    install_requires=["numpy", "zstandard", "lzstring", "flask", "flask-cors"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["id-pack=id_pack.cli:main"]},
    python_requires=">=3.9",
)
