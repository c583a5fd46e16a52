"""Setup configuration for jobtrends"""

from setuptools import setup, find_packages

setup(
    name="job-trends-analytics",
    version="0.1.0",
    description=(
        "Job application trend analytics: volume over time, weekly velocity, "
        "response times and benchmark-based success probability."
    ),
    author="Job Trends Analytics Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
        "python-dateutil>=2.8.2",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "job-trends=jobtrends.main:main",
        ],
    },
)
