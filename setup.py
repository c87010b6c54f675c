from setuptools import find_packages, setup

setup(
    name="cachematrix",
    version="0.1.0",
    description="Matrix inversion that computes once and caches the result",
    packages=find_packages(include=["cachematrix", "cachematrix.*"]),
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={
        "torch": ["torch"],
        "bench": ["matplotlib"],
        "test": ["pytest"],
    },
)
