from setuptools import setup, find_namespace_packages

setup(
    name="book_manager",
    version="1.0.0",
    packages=find_namespace_packages(include=['cli*', 'core*', 'api*']),
    include_package_data=True,
    package_data={
        "core": ["templates/*.html", "static/css/*.css", "static/js/*.js"],
    },
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "beautifulsoup4",
        "fastapi",
        "pydantic>=2",
        "python-multipart",
        "Jinja2",
        "MarkupSafe",
        "python-slugify",
    ],
    extras_require={
        "server": ["uvicorn"],
        "test": ["pytest", "httpx"],
    },
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "book-manager=cli.main:main",
        ],
    },
)
