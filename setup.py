from glob import glob
from setuptools import setup


setup(
    name='precalc',
    version='0.1.0',
    description='Arbitrary precision expression calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
        'mpmath',
    ],
    packages=['precalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.9',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    tests_require=[
        'pytest',
        'pytest-cov',
        'coverage',
        'flake8',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
