import setuptools

setuptools.setup(
    name = 'strokefit',
    version = '1.0',
    description = 'curve fitting for freehand strokes',
    packages = setuptools.find_packages(exclude=['tests', 'tests.*']),
    install_requires=['numpy', 'scipy'],
    extras_require={'test': ['pytest']},
)
