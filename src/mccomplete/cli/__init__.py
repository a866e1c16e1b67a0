"""Click command line interface and interactive REPL."""
