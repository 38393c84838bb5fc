from setuptools import setup, find_packages

setup(
    name="tgph-charts",
    version="0.1.0",
    description="TGPH telemetry snapshot decoder and downsampling line-chart engine",
    author="adamfilli",
    packages=find_packages(include=["tgph", "tgph.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
        "psutil",
        "requests",
    ],
    extras_require={
        "visual": [
            "fastapi",
            "uvicorn",
        ],
        "test": [
            "pytest",
            "httpx",
            "fastapi",
            "uvicorn",
        ],
    },
    entry_points={
        "console_scripts": [
            "tgph-collect=tgph.collector:main",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
