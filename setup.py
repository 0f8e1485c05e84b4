from setuptools import setup, find_packages

# running some setup and configuring the CLI
setup(
    name="emoji_picker",
    version="0.1.0",
    packages=find_packages(),
    # templates and static assets served by flask
    package_data={
        "emoji_picker": [
            "templates/*.html",
            "static/css/*.css",
            "static/js/*.js",
        ],
    },
    # auto install dependencies
    install_requires=[
        # web/server dependencies
        "flask",
        "python-dotenv",
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    # registers the dev_cli main function as "emoji-picker" in the CLI
    entry_points={
        "console_scripts": [
            "emoji-picker=cli.dev_cli:main",
        ]
    },
    python_requires=">=3.8",
)
