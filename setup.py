from setuptools import setup, find_packages


install_requires = [
    'botocore>=1.12.54',
    'blinker>=1.3',
    'typing-extensions>=4; python_version<"3.8"',
]

setup(
    name='pynamoadmin',
    version=__import__('pynamoadmin').__version__,
    packages=find_packages(exclude=('tests', 'tests.integration',)),
    description='Table administration for DynamoDB: create, describe, update, delete and list tables',
    long_description=open('README.rst').read(),
    long_description_content_type='text/x-rst',
    zip_safe=False,
    license='MIT',
    keywords='python dynamodb amazon',
    python_requires=">=3.7",
    install_requires=install_requires,
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Programming Language :: Python',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3.7',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'License :: OSI Approved :: MIT License',
    ],
    extras_require={
        'test': ['pytest>=6', 'pytest-mock'],
    },
    package_data={'pynamoadmin': ['py.typed']},
)
