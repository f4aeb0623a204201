from setuptools import setup, find_namespace_packages

setup(
    name="minimax-reversi",
    version="0.1",
    packages=find_namespace_packages(include=["src", "src.*"]),
    install_requires=[
        'numpy>=1.19.0',
        'torch>=1.8.0',
        'tensorboard>=2.4.0',
        'tqdm>=4.50.0',
    ],
    extras_require={
        'test': ['pytest>=6.0'],
    },
    python_requires='>=3.7',
)
