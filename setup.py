from setuptools import setup, find_packages

setup(
    name='tractor_boulder_env',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'scripts']),
    package_data={
        'tractor_boulder_env.envs': ['configs/*.yaml', 'configs/tasks/*.yaml'],
    },
    install_requires=[
        'gymnasium',
        'numpy',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
