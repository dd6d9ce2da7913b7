from setuptools import setup, find_packages
setup(
    name="deal_pipeline",
    version="0.1.0",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=["pydantic>=2"],
    extras_require={"test": ["pytest"]},
    entry_points={
        'console_scripts': [
            'deal_pipeline=deal_pipeline.__main__:_safe_main'
        ]
    }
)
