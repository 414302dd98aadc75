from setuptools import setup, find_packages

# the gateware model and its simulation tests are written against amaranth 0.4.
# 0.5 removes the Memory API they use.

setup(
    name="perichain",
    version="0.1",
    description="peripheral chain and enumerator ROM generator for FPGA builds",
    packages=find_packages(),
    install_requires=[
        "crcmod",
        "numpy",
        "pyserial",

        "amaranth>=0.4,<0.5",
    ]
)
