import sys
import re

from setuptools import setup

if __name__ == '__main__':
    with open("src/remotemath/constants.py") as constants_file:
        # extract the VERSION definition from the remotemath.constants module without importing it
        version_line = next(line for line in constants_file if line.startswith("VERSION"))
        remotemath_version = re.match("VERSION ?= ?['\"](.+)['\"]", version_line).group(1)
    print('remotemath version = %s' % remotemath_version)

    setupargs = {
        "name": "remotemath",
        "version": remotemath_version,
        "license": "MIT",
        "description": "math object published in the Pyro name server for remote callers",
        "long_description": """remotemath exports a single math object with Pyro and binds it
in a Pyro name server under the name "Compute", so that other processes
can look it up by name and call its methods as if they were local calls.
A small command line client is included.
""",
        "keywords": "distributed objects, remote method call, name server, Pyro",
        "package_dir": {'': 'src'},
        "packages": ['remotemath'],
        "scripts": [],
        "platforms": "any",
        "python_requires": ">=3.6",
        "install_requires": ["Pyro4>=4.80", "serpent>=1.16"],
        "extras_require": {
            "test": ["pytest"]
        },
        "classifiers": [
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "Intended Audience :: Education",
            "License :: OSI Approved :: MIT License",
            "Operating System :: OS Independent",
            "Programming Language :: Python",
            "Programming Language :: Python :: 3",
            "Topic :: System :: Distributed Computing",
            "Topic :: System :: Networking"
        ],
        "entry_points": {
            'console_scripts': [
                'remotemath-server = remotemath.server:main',
                'remotemath-client = remotemath.client:main',
                'remotemath-check-config = remotemath.configuration:configuration_dump'
            ]
        }
    }

    setup(**setupargs)

    if len(sys.argv) >= 2 and sys.argv[1].startswith("install"):
        print("\nOnly the remotemath package has been installed (version %s)." % remotemath_version)
        print("A Pyro name server must be running before starting the server: python -m Pyro4.naming")
