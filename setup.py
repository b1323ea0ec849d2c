#!/usr/bin/env python3
"""
Setup script for NodTurn
"""

from setuptools import setup, find_packages

# Keep in sync with requirements.txt
REQUIREMENTS = [
    "numpy",
    "opencv-python",
    "mediapipe",
    "PyYAML",
    "python-dotenv",
]

setup(
    name="nodturn",
    version="0.1.0",
    description="Hands-free page turning from webcam head tilt gestures",
    python_requires=">=3.9",
    packages=find_packages(include=["nodturn", "nodturn.*"]),
    install_requires=REQUIREMENTS,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "nodturn=nodturn.main:cli",
        ],
    },
)
