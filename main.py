from rich.pretty import pprint

from argbind import *

parser = Parser("greet", descr="say hello to someone", version="1.0.0", shell=True, colorful=True)
parser.add_argument("-u", "--upper", action="store_true", default="false", descr="shout the greeting")
parser.add_argument("name", required=True, default="John", descr="who to greet")


if __name__ == '__main__':
    pprint(parser)
    pprint(invoke(parser, "Vader -u"))
    invoke(parser)
