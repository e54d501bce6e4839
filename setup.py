from setuptools import setup, find_namespace_packages

setup(
    name="ssq_ai",
    version="1.0.0",
    description="Double Color Ball frequency-weighted prediction engine - hot/cold weighting with ranked candidates",
    packages=find_namespace_packages(include=["ssq_ai", "ssq_ai.*"]),
    python_requires=">=3.9",
    install_requires=[
        'numpy>=1.24.0',
        'pandas>=2.0.0',
        'scipy>=1.11.0',
        'sqlalchemy>=2.0.0',
        'python-dateutil>=2.8.2',
        'fastapi>=0.100.0',
        'uvicorn>=0.23.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'httpx>=0.24.0',
        ]
    }
)
