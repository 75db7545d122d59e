from setuptools import setup, find_packages


setup(
    name="quatalg",
    version="1.0.0",
    description="Quaternion arithmetic and rotation utilities built on numpy",
    packages=find_packages(include=["quatalg", "quatalg.*"]),
    python_requires=">=3.11",
    install_requires=["numpy", "pandas"],
    extras_require={"test": ["pytest", "scipy"]},
)
