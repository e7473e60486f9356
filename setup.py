import re

from setuptools import find_packages, setup


with open("shadergen/_version.py", "rb") as fh:
    init_text = fh.read().decode()
    VERSION = re.search(r"__version__ = \"(.*?)\"", init_text).group(1)


runtime_deps = [
    "numpy",
    "Jinja2",
]

extras_require = {
    "dev": [
        "black",
        "flake8",
        "flake8-black",
        "pep8-naming",
        "pytest",
        "setuptools",
        "wheel",
        "twine",
    ],
    "docs": [
        "sphinx>7.2",
        "sphinx_rtd_theme",
        "numpy",
        "jinja2",
    ],
}


setup(
    name="shadergen",
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "shadergen": ["templates/*.hlsl", "templates/helpers/*.hlsli"],
    },
    python_requires=">=3.8.0",
    install_requires=runtime_deps,
    extras_require=extras_require,
    license="BSD 2-Clause",
    description="Shader permutation and parameter-metadata engine",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    zip_safe=False,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Multimedia :: Graphics :: 3D Rendering",
    ],
    entry_points={
        "console_scripts": [
            "shadergen = shadergen.__main__:main",
        ],
    },
)
