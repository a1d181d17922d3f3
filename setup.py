from setuptools import setup, find_packages
from pathlib import Path

package_name = 'ecr-pull-secret-operator'
description = (
    'A Kubernetes Operator that keeps an Amazon ECR image pull secret in '
    'every namespace and attaches it to the default ServiceAccount.'
)
author = 'ecr-pull-secret-operator developers'
author_email = 'ecr-pull-secret-operator@users.noreply.github.com'
license = 'MIT'
url = 'https://github.com/ecr-pull-secret-operator/ecr-pull-secret-operator'
pypi_classifiers = [
    'Development Status :: 4 - Beta',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3.10',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
]
keywords = ['kubernetes', 'operator', 'ecr']
readme = Path(__file__).parent / 'README.rst'

# Core dependencies
install_requires = [
    'kopf>=1.37',
    'kubernetes>=28.1.0',
    'structlog>=23.1.0',
    'boto3>=1.28',
    'botocore>=1.31',
    'urllib3>=1.26',
]

# Test dependencies
tests_require = [
    'pytest>=7.4',
    'pyyaml>=6.0',
]
tests_require += install_requires

# Optional dependencies (like for dev)
extras_require = {
    'test': tests_require,
    # For development environments
    'dev': tests_require,
}

setup(
    name=package_name,
    description=description,
    long_description=readme.read_text(),
    long_description_content_type='text/x-rst',
    author=author,
    author_email=author_email,
    url=url,
    license=license,
    classifiers=pypi_classifiers,
    keywords=keywords,
    python_requires='>=3.10',
    package_dir={'': 'src'},
    packages=find_packages('src', exclude=['docs', 'tests']),
    install_requires=install_requires,
    tests_require=tests_require,
    extras_require=extras_require,
    use_scm_version={'fallback_version': '0.0.0'},
    include_package_data=True
)
