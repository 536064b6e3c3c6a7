import sys

from rich.pretty import pprint

from optscan import *

verbose = Option("v", "verbose")
output = Option("o", "output", consumer=String(), required=True)
jobs = Option("j", "jobs", consumer=Integer())
define = Option("D", "define", consumer=Collect(), repeatable=True, required=True)


if __name__ == '__main__':
    parser = Parser([verbose, output, jobs, define])
    index = parser.process(sys.argv)
    pprint({
        "options": list(parser.table),
        "operands": sys.argv[index:],
        "error": parser.error,
    })
    sys.exit(2 if parser.error else 0)
