from setuptools import setup

setup(
    name='lz4stream',
    version='0.1.0',
    author='nathants',
    author_email='me@nathants.com',
    url='http://github.com/nathants/lz4stream/',
    description='streaming lz4 frame writer and reader over liblz4, via cffi',
    packages=['lz4stream'],
    python_requires='>=3.7',
    install_requires=['cffi>=1.12.0'],
    extras_require={'test': ['pytest', 'lz4>=3.0.0']},
    entry_points={'console_scripts': ['lz4stream=lz4stream.__main__:main']},
)
