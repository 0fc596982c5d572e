from setuptools import setup, find_packages

setup(
    name="digifilter",
    version="0.0.1",
    description="Recursive digital filter with dead zone and low-pass coefficient generators.",
    packages=find_packages(".", include=["digifilter", "digifilter.*"]),
    python_requires=">=3.8",
    install_requires=["numpy", "scipy", "h5py", "setproctitle"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "digifilter-play = digifilter.play:main",
        ],
    },
)
