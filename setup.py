from setuptools import find_packages, setup

package_name = "scanner_registration"

setup(
    name="scanner-registration",
    version="0.1.0",
    packages=find_packages(exclude=["test", "test.*"]),
    data_files=[
        (
            "share/" + package_name + "/config",
            [
                "config/scanner_registration_base.yaml",
            ],
        ),
    ],
    python_requires=">=3.10",
    install_requires=["setuptools", "numpy", "scipy", "pyyaml", "pydantic>=2"],
    extras_require={"test": ["pytest"]},
    zip_safe=True,
    maintainer="you",
    maintainer_email="you@example.com",
    description="Register axis-aligned 3D scanners by shared beacons and merge their point clouds",
    license="Apache-2.0",
    entry_points={
        "console_scripts": [
            "scanner-registration = scanner_registration.cli:main",
        ],
    },
)
