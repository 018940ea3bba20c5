# cyclewatch/cli/commands/__init__.py
# Typer subcommands; each module registers itself on the root app when imported
