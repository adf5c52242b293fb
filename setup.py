from setuptools import setup

setup(
    name="chip8",
    version="0.1.0",
    description="CHIP-8 virtual machine with an SDL2 front end",
    python_requires=">=3.8",
    py_modules=[
        "beeper",
        "chip8",
        "config",
        "cpu",
        "display",
        "errors",
        "headless_run",
        "instructions",
        "keypad",
        "main",
        "memory",
        "registers",
        "screenshot",
        "timers",
        "utils",
    ],
    install_requires=[
        "PySDL2",
        "pysdl2-dll",
        "Pillow",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "chip8=main:main",
            "chip8-headless=headless_run:main",
        ],
    },
)
