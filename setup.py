from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="catalogdash",
    version="0.1.0",
    description="Flask admin backend for an e-commerce product catalog: admin accounts, product CRUD, image uploads and dashboard statistics",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["catalogdash", "catalogdash.*"]),
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
        "pymongo>=4.6",
        "PyJWT>=2.8.0",
        "bcrypt>=4.1.0",
        "cloudinary>=1.36.0",
        "pydantic[email]>=2.5",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-flask>=1.2",
            "mongomock>=4.1",
            "black>=22.0",
            "flake8>=5.0",
        ],
    },
    include_package_data=True,
    package_data={
        "catalogdash": [
            "modules/*/templates/**/*.html",
        ],
    },
    zip_safe=False,
)
