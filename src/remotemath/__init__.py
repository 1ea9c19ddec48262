"""
remotemath package. Some generic init stuff to set up logging etc.

remotemath - publish a math object with Pyro.
"""

from remotemath.constants import VERSION as __version__


def _configLogging():
    """Do some basic config of the logging module at package import time.
    The configuring is done only if the REMOTEMATH_LOGLEVEL env var is set.
    If you want to use your own logging config, make sure you do
    that before any remotemath imports. Then remotemath will skip the autoconfig.
    Set the env var REMOTEMATH_LOGFILE to change the name of the autoconfigured
    log file (default is remotemath.log in the current dir). Use '{stderr}' to
    make the log go to the standard error output."""
    import os
    import logging

    level = os.environ.get("REMOTEMATH_LOGLEVEL")
    logfilename = os.environ.get("REMOTEMATH_LOGFILE", "remotemath.log")
    if logfilename == "{stderr}":
        logfilename = None
    if level not in (None, ""):
        levelvalue = getattr(logging, level.upper(), None)
        if not isinstance(levelvalue, int):
            raise ValueError("invalid log level: REMOTEMATH_LOGLEVEL=%s" % level)
        if len(logging.root.handlers) == 0:
            # configure the logging with some sensible defaults.
            try:
                if logfilename:
                    import tempfile
                    logfile_dir = os.path.dirname(os.path.expanduser(logfilename))
                    tempfile = tempfile.TemporaryFile(dir=logfile_dir or None)
                    tempfile.close()
            except OSError:
                # cannot write in the desired logfile directory, use the default console logger
                logging.basicConfig(level=levelvalue)
                logging.getLogger("remotemath").warning("unable to write to the desired logfile (access rights?), falling back to console logger")
            else:
                logging.basicConfig(
                    level=levelvalue,
                    filename=logfilename,
                    datefmt="%Y-%m-%d %H:%M:%S",
                    format="[%(asctime)s.%(msecs)03d,%(name)s,%(levelname)s] %(message)s"
                )
            log = logging.getLogger("remotemath")
            log.info("remotemath log configured using built-in defaults, level=%s", level)
    else:
        # REMOTEMATH_LOGLEVEL is not set, disable remotemath logging. No message is printed about this fact.
        log = logging.getLogger("remotemath")
        log.setLevel(9999)


_configLogging()
del _configLogging

# import the public symbols into this package
from remotemath.configuration import config
from remotemath.mathservice import IRemoteMath, RemoteMath
from remotemath.server import MathServer, startup
from remotemath.client import connect
