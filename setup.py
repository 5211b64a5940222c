from setuptools import find_packages, setup

setup(
    name='shell-jobpool',
    version='1.0.0',
    description='Run shell jobs in parallel on a fixed pool of workers',
    packages=find_packages(exclude=[
        'jobpool.test',
        'jobpool.test.*',
    ]),
    python_requires='>=3.8',
    install_requires=[
        'chardet',
        'python-dateutil',
    ],
    extras_require={
        'test': [
            'mock',
            'pytest',
        ],
    },
    entry_points={
        "console_scripts": [
            "jobpool = jobpool.main:main",
        ],
    }
)
