from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pyfastscale",
    version="0.0.1",
    author="pyfastscale contributors",
    description="GPU raster upscaling with edge enhancement and alpha-aware blending",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    ],
    python_requires=">=3.10",
    install_requires=[
        "taichi>=1.4.0",
        "numpy>=1.20.0",
        "matplotlib>=3.3.0",
        "click>=7.0",
        "pillow>=9.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
        ],
    },
    keywords="image upscaling sharpening alpha GPU taichi",
    entry_points={
        "console_scripts": [
            "pfs-upscale=pyfastscale.cli.upscale_commands:upscale",
            "pfs-watch=pyfastscale.cli.watch_commands:watch",
            "pfs-batch=pyfastscale.cli.watch_commands:batch",
            "pfs-compare=pyfastscale.cli.compare_commands:compare",
        ],
    },
)
