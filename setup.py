from mypyc.build import mypycify
from setuptools import setup

setup(
    name="gaussint",
    version="0.1.0",

    # errors.py and ring.py stay pure Python (exception subclasses and the Protocol),
    #   so the package itself is shipped and the compiled modules sit next to their sources.
    packages=["gaussint"],

    install_requires=["sympy"],
    extras_require={"test": ["pytest"]},

    ext_modules=mypycify([
        "gaussint/gauss.py",
        "gaussint/utils.py",
    ]),

    license="MIT",
)
