import re

from setuptools import find_packages, setup


def get_version():
    with open('binoforest/version.py') as f:
        return re.search(r"__version__\s*=\s*['\"]([^'\"]+)['\"]",
                         f.read()).group(1)


setup(name='binoforest',
      version=get_version(),
      description='Mergeable max-priority queue built on binomial trees',
      packages=find_packages(exclude=['tests', 'tests.*']),
      python_requires='>=3.9',
      install_requires=['treelib>=1.6.4'],
      extras_require={'test': ['pytest', 'numpy']})
