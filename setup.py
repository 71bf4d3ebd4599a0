import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="prisma_zod_gen",
    version="1.0.1",
    description="Generate Zod validation schemas from Prisma client TypeScript declarations",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Text Processing",
        "Intended Audience :: Developers",
    ],
    keywords="prisma zod typescript schema code generation validation",
    url="https://github.com/madlag/prisma_zod_gen",
    author="François Lagunas",
    author_email="francois.lagunas@gmail.com",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        "tree-sitter>=0.23.0",
        "tree-sitter-typescript>=0.23.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "prisma_zod_gen=prisma_zod_gen.prisma_zod_gen:prisma_zod_gen",
        ],
    },
    include_package_data=True,
    package_data={
        "prisma_zod_gen": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
