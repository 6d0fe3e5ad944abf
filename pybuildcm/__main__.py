from pybuildcm.main import cli

cli()
