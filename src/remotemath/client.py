"""
Client for the math server: looks up the math object by name and calls it.

  :command:`remotemath-client add 3 4`

remotemath - publish a math object with Pyro.
"""

import sys
import logging
import Pyro4
import Pyro4.errors
import Pyro4.util
from remotemath import constants, configuration

__all__ = ["connect", "main"]

log = logging.getLogger("remotemath.client")

OPERATIONS = ("add", "subtract", "multiply", "divide")


def connect(name=None, host=None, port=None):
    """Returns a proxy for the math object that is bound in the name server under the given name."""
    config = configuration.config
    uri = "PYRONAME:%s@%s:%d" % (name or config.OBJECT_NAME, host or config.NS_HOST, port or config.NS_PORT)
    log.debug("connecting to %s", uri)
    return Pyro4.Proxy(uri)


def number(text):
    try:
        return int(text)
    except ValueError:
        return float(text)


def main(args=None):
    from optparse import OptionParser
    config = configuration.config
    parser = OptionParser(usage="usage: %prog [options] {add,subtract,multiply,divide} A B | computations",
                          version="%prog " + constants.VERSION)
    parser.add_option("-n", "--nshost", default=config.NS_HOST, help="name server host (default=%default)")
    parser.add_option("-P", "--nsport", type="int", default=config.NS_PORT, help="name server port (default=%default)")
    parser.add_option("-o", "--name", default=config.OBJECT_NAME, help="name of the math object (default=%default)")
    options, args = parser.parse_args(args)
    if not args:
        parser.error("missing operation")
    operation = args[0]
    if operation == "computations":
        if len(args) != 1:
            parser.error("computations takes no arguments")
        operands = ()
    elif operation in OPERATIONS:
        if len(args) != 3:
            parser.error("%s takes exactly two numbers" % operation)
        try:
            operands = tuple(number(arg) for arg in args[1:])
        except ValueError as x:
            parser.error(str(x))
    else:
        parser.error("unknown operation: %s" % operation)

    try:
        with connect(options.name, options.nshost, options.nsport) as math:
            result = getattr(math, operation)(*operands)
    except Pyro4.errors.PyroError as x:
        log.error("cannot reach the math object %r: %s", options.name, x)
        sys.stderr.write("".join(Pyro4.util.getPyroTraceback()))
        return 1
    except Exception as x:
        # any error raised by the remote math object
        log.error("remote %s failed: %s", operation, x)
        sys.stderr.write("".join(Pyro4.util.getPyroTraceback()))
        return 1
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
