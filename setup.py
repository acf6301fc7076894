from setuptools import setup, find_packages

setup(
    name="atelie",
    version="1.0.0",
    packages=find_packages(include=["atelie", "atelie.*"]),
    include_package_data=True,
    package_data={"atelie.presentation": ["templates/*.html", "templates/*/*.html"]},
    install_requires=[
        "django>=4.2",
        "djangorestframework",
        "drf-spectacular",
        "djangorestframework-simplejwt",
        "psycopg2-binary",
        "python-decouple",
        "qrcode[pil]",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-django",
        ],
    },
    python_requires=">=3.11",
)
