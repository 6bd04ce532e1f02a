"""
MetroGuide Backend - Package Build Script

Shortest-path metro trip planner with per-step boarding position guidance.
"""

from setuptools import setup, find_packages


setup(
    name='metroguide',
    version='1.2.0',
    author='MetroGuide Team',
    description='Metro trip planner with boarding position guidance',
    long_description='''
    Builds a weighted graph from metro line and station data, finds the
    shortest path between two stations, splits it into start / transfer /
    exit steps and resolves where to board the train at each step.
    ''',
    packages=find_packages(include=['metroguide', 'metroguide.*']),
    install_requires=[
        'fastapi>=0.110.0',
        'uvicorn>=0.27.0',
        'starlette>=0.36.0',
        'pydantic>=2.5.0',
        'python-dotenv>=1.0.0',
        'networkx>=3.2',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
            'pytest-mock>=3.12.0',
            'httpx>=0.26.0',
        ],
    },
    zip_safe=False,
    python_requires='>=3.10',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Scientific/Engineering :: GIS',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
)
