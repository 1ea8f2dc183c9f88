# coding: utf-8
from setuptools import find_packages, setup


with open('README.md', encoding='utf8') as file:
    long_description = file.read()

setup(
    name='http-api-handler',
    version='1.0',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    python_requires='>=3.8',
    license='MIT',
    description='JSON API requests wrapper with logging and typed errors',
    long_description=long_description,
    long_description_content_type='text/markdown',
    install_requires=[
        'httpx',
        'rich>=13.8',
    ],
    extras_require={
        'requests': ['requests'],
        'test': ['pytest', 'requests'],
    },
)
