from setuptools import setup, find_packages

with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setup(
    name='beamscorer',
    version='0.1.0',
    description="Trie and KenLM language model scorers for CTC beam search decoding.",
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'kenlm': ['kenlm'],
        'test': ['pytest', 'numpy'],
    },
    entry_points={
        'console_scripts': [
            'beamscorer-generate-trie=beamscorer.generate_trie:main',
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ]
)
