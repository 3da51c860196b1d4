from setuptools import setup, find_packages

package_name = 'robot_arena2d'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    python_requires='>=3.10',
    install_requires=['setuptools', 'numpy', 'pygame'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='shluf',
    maintainer_email='luthfisalis09@gmail.com',
    description='Viewer 2D pose banyak robot beroda dengan Pygame',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'robot-arena2d = robot_arena2d.viewer_node:main',
        ],
    },
)
