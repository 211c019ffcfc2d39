from setuptools import setup

with open("README.md", "r") as fh:
    readme = fh.read()

setup(
  name = 'nifti1',
  packages = ['nifti1'],
  version = '0.1.0',
  license='Apache license 2.0',
  description = 'Reading, modifying and writing NIFTI-1 (.nii/.nii.gz) neuroimaging files',
  long_description=readme,
  long_description_content_type="text/markdown",
  author = 'nifti1 developers',
  platforms="any",
  keywords = ['NIFTI', 'NIfTI-1', 'MRI', 'neuroimaging', 'Encoder', 'Decoder'],
  python_requires='>=3.6',
  install_requires=[
        'numpy>=1.8.0'
      ],
  classifiers=[
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: Apache Software License',
    'Programming Language :: Python :: 3',
    'Topic :: Scientific/Engineering :: Medical Science Apps.',
    'Topic :: Software Development :: Libraries',
    'Topic :: Software Development :: Libraries :: Python Modules'
  ]
)
