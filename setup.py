from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="image_marker",
    version=Path("./image_marker/VERSION").read_text().strip(),
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"image_marker": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python-headless",
        "easydict",
        "Pillow",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["image_marker=image_marker.cli:main"],
    },
)
