# setup.py
from setuptools import setup, find_packages

setup(
    name="a11y_scout",
    version="0.1.0",
    description="Обход сайта и аудит доступности страниц A11yScout",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"a11y_scout.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
        "playwright>=1.40",
        "axe-playwright-python>=0.1.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "a11y-scout=a11y_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
