from setuptools import setup, find_packages

setup(
    name='fib-bench',
    version='0.1.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=[
        'PyYAML>=6.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'fib-bench=fib_bench.cli:main',
        ],
    },
    description='Naive recursive Fibonacci microbenchmark',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Topic :: System :: Benchmark',
    ],
    keywords='fibonacci recursion benchmark',
    python_requires='>=3.8',
)
