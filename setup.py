"""Bootstrap 3 tabbable panes

Render Bootstrap 3 tab and pill navigation together with its tab-content
panes. Links and panes are wired together by generated ids and data-toggle
attributes so that Bootstrap's tab plugin can switch between them.
"""

from setuptools import setup

description, long_description = __doc__.split('\n\n', 1)

setup(
    name='tabpanes',
    version='0.1.0',

    description=description,
    long_description=long_description,
    license='BSD',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Internet :: WWW/HTTP :: Dynamic Content',
        'Environment :: Web Environment',
        'Programming Language :: Python',
        'Programming Language :: Python :: Implementation :: CPython',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
    ],
    keywords='bootstrap tabs html',

    packages=['tabpanes'],
    py_modules=['tabpanesrt'],
    python_requires='>=3.7',

    install_requires=[],
    extras_require={
        'test': ['pytest', 'beautifulsoup4', 'lxml'],
    },
    entry_points={
        'console_scripts': [
            'tabpanes=tabpanes.Tabbable:main',
        ],
    },
)
