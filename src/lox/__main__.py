from lox.cli import entry

entry()
