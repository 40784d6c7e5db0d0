from setuptools import setup, find_packages

setup(name='ShareCal',
      version='0.1',
      description='Python implementation of a subsector market-share allocation and calibration engine',
      author='Jillian Anderson & Bradford Griffin',
      author_email='jilliana@sfu.ca',
      packages=find_packages(exclude=['tests', 'tests.*']),
      install_requires=[
          'networkx',
          'numpy',
          'pandas>=1.2',
          'polars',
          'pyarrow',
          'scipy',
      ],
      extras_require={
          'test': ['pytest'],
      },
      )
