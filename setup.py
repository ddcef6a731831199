from setuptools import setup

setup(
    name='atmfjstc-srr-file',
    version='0.1.0',

    author_email='atmfjstc@protonmail.com',

    package_dir={'': 'src'},
    packages=['atmfjstc.lib.srr_file'],

    install_requires=[
        'atmfjstc-binary-utils>=1.2.0, <2',
        'atmfjstc-cli-utils>=1.8.0, <2',
    ],

    entry_points={
        'console_scripts': [
            'srr-info=atmfjstc.lib.srr_file.cli:main',
        ],
    },

    zip_safe=True,

    description="Utilities for decoding ReScene SRR files",

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Topic :: System :: Archiving",
        "Typing :: Typed",
    ],
    python_requires='>=3.7',
)
