from setuptools import setup, find_packages

setup(
    name='rexster-client',
    version='0.1.0',
    description='Rexster Client',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=["rexster_client_test", "rexster_client_test.*"]),
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'rexster-client=rexster_client.cmd.rexster_repl:main',
        ],
    },

    license='Apache License 2.0',
    install_requires=[
        "requests>=2.27.0",
        "PyYAML>=6.0",
        "pydantic>=2.0",
        "python-dotenv",
        "prompt_toolkit>=3.0",
        "tabulate",
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.11',
)
