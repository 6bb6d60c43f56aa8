from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pointnow-admin",
    version="0.1.0",
    author="PointNow",
    description="Admin dashboard for the PointNow loyalty platform: analytics proxy, businesses, customers and revenue",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pointnow_admin", "pointnow_admin.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: Flask",
    ],
    python_requires=">=3.9",
    install_requires=[
        "Flask>=3.0.0",
        "Flask-CORS>=4.0.0",
        "python-dotenv>=1.0.0",
        "requests>=2.28.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-flask>=1.2",
            "black>=22.0",
            "flake8>=5.0",
        ],
    },
    include_package_data=True,
    package_data={
        "pointnow_admin": [
            "modules/*/templates/**/*.html",
            "modules/*/static/*.css",
            "modules/*/static/*.js",
        ],
    },
    zip_safe=False,
)
