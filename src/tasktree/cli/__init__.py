"""Console front-end: bootstrap (wiring), command registry, REPL loop and entry point."""
