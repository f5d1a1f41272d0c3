from setuptools import setup, find_packages
import os


def get_version():
    """
    Gets the version number. Pulls it from the source files rather than
    duplicating it.
    """
    fn = os.path.join(os.path.dirname(__file__), 'src', 'hetri', '__init__.py')
    try:
        with open(fn, 'r') as fh:
            lines = fh.readlines()
    except IOError:
        raise RuntimeError("Could not determine version number"
                           "(%s not there)" % (fn))
    version = None
    for l in lines:
        # include the ' =' as __version__ might be a part of __all__
        if l.startswith('__version__ =', ):
            version = l[13:].strip().strip("'\"")
            break
    if version is None:
        raise RuntimeError("Could not determine version number: "
                           "'__version__ =' string not found")
    return version


PACKAGES = find_packages('src')
REQUIREMENTS = ["geompreds"]
TEST_REQUIREMENTS = ["pytest"]

setup(
    name="hetri",
    version=get_version(),
    packages=PACKAGES,
    package_dir={"": "src"},
    author="Martijn Meijers",
    description="Incremental (constrained) Delaunay triangulation on a "
                "half edge mesh (pure Python)",
    license="MIT license",
    zip_safe=False,
    python_requires=">=3.6",
    install_requires=REQUIREMENTS,
    extras_require={"test": TEST_REQUIREMENTS},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Information Technology",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Scientific/Engineering :: GIS",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
)
