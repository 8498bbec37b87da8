from setuptools import setup, find_packages

setup(
    name="grid-path-planner",
    version="1.0.0",
    packages=find_packages(include=["pathplanner", "pathplanner.*"]),
    install_requires=[
        "numpy>=1.21.0",
        "scipy>=1.7.0",
        "PyYAML>=6.0",
        "pandas>=1.4.0",
        "matplotlib>=3.5.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    author="Grid Path Planner Team",
    description="Grid path planning engine: Dijkstra, A* and RRT* on 2D occupancy grids",
    python_requires=">=3.8",
)
