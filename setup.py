# type: ignore
from setuptools import find_packages, setup

# Get VERSION constant from ldcontext.version - we can't simply import that module because
# ldcontext/__init__.py imports the rest of the package. Based on
# https://packaging.python.org/guides/single-sourcing-package-version/
version_module_globals = {}
with open('./ldcontext/version.py') as f:
    exec(f.read(), version_module_globals)
ldcontext_version = version_module_globals['VERSION']


def parse_requirements(filename):
    """ load requirements from a pip requirements file """
    with open(filename) as f:
        lineiter = (line.strip() for line in f)
        return [line for line in lineiter if line and not line.startswith("#")]


install_reqs = parse_requirements('requirements.txt')
test_reqs = parse_requirements('test-requirements.txt')

setup(
    name='launchdarkly-context-codec',
    version=ldcontext_version,
    author='LaunchDarkly',
    author_email='team@launchdarkly.com',
    packages=find_packages(exclude=['ldcontext.testing', 'ldcontext.testing.*']),
    description='JSON codec for LaunchDarkly evaluation contexts',
    long_description='Decodes and encodes LaunchDarkly evaluation contexts, including the legacy user format',
    install_requires=install_reqs,
    python_requires='>=3.8',
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development',
        'Topic :: Software Development :: Libraries',
    ],
    extras_require={
        "test": test_reqs,
    },
)
