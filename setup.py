# This should be only one line. If it must be multi-line, indent the second
# line onwards to keep the PKG-INFO file format intact.
"""Assemble HAProxy log-forward configuration from ordered fragments.
"""

from setuptools import find_packages, setup

version = open("src/haproxycfg/version.txt").read().strip()

setup(
    name="haproxycfg",
    version=version,
    install_requires=[
        "Jinja2",
        "importlib_resources",
        "py",
        "setuptools>=38.3", ],
    extras_require={
        "test": [
            "mock",
            "pytest",
            "pytest-coverage",
            "pytest-instafail",
            "pytest-timeout", ]},
    entry_points="""
        [console_scripts]
            haproxycfg = haproxycfg.main:main
    """,
    license="BSD (2-clause)",
    keywords="haproxy configuration",
    classifiers="""\
License :: OSI Approved :: BSD License
Programming Language :: Python
Programming Language :: Python :: 3
Programming Language :: Python :: 3 :: Only
"""[:-1].split("\n"),
    description=__doc__.strip(),
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={"haproxycfg": ["version.txt", "templates/*.jinja2"]},
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.6")
