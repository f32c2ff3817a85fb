from setuptools import setup, find_packages

setup(
    name='sharkprio',
    version='0.1.0',
    description='Raster tools for shark conservation priority scoring',
    author='Matthew Whittle',
    author_email='matthewjwhittle@gmail.com',
    packages=find_packages(include=['sharkprio', 'sharkprio.*']),
    python_requires='>=3.11',
    install_requires=[
        'numpy',
        'pandas',
        'xarray',
        'rioxarray',
        'rasterio',
        'affine<3',
        'rio-cogeo',
        'geopandas',
        'shapely',
        'scipy',
        'typer',
        'typing_extensions',
        'pyyaml',
        'pyhere',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'sharkprio=sharkprio.cli:app',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
)
