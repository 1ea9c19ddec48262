"""
Configuration settings.

remotemath - publish a math object with Pyro.
"""

# Env vars used at package import time (see __init__.py):
# REMOTEMATH_LOGLEVEL   (enable remotemath log config and set level)
# REMOTEMATH_LOGFILE    (the name of the logfile if you don't like the default)

import os
import platform
import Pyro4
import serpent
import remotemath.constants


class Configuration(object):
    __slots__ = ("HOST", "PORT", "NS_HOST", "NS_PORT", "NS_BROADCAST",
                 "NS_REBIND", "NS_CLEANUP", "OBJECT_NAME")

    def __init__(self):
        self.reset()

    def reset(self, useenvironment=True):
        """
        Set default config items.
        If useenvironment is False, won't read environment variables settings (useful if you can't trust your env).
        """
        self.HOST = "localhost"  # don't expose the math object to the outside world by default
        self.PORT = 0  # 0 = random port
        self.NS_HOST = "localhost"
        self.NS_PORT = 9090  # Pyro's default name server port
        self.NS_BROADCAST = False  # let Pyro discover the name server instead of connecting to NS_HOST:NS_PORT
        self.NS_REBIND = False  # overwrite an existing registration of OBJECT_NAME?
        self.NS_CLEANUP = False  # remove the registration again when the server shuts down?
        self.OBJECT_NAME = remotemath.constants.MATHSERVICE_NAME

        if useenvironment:
            # process environment variables
            PREFIX = "REMOTEMATH_"
            for symbol in self.__slots__:
                if PREFIX + symbol in os.environ:
                    value = getattr(self, symbol)
                    envvalue = os.environ[PREFIX + symbol]
                    if value is not None:
                        valuetype = type(value)
                        if valuetype is bool:
                            # booleans are special
                            envvalue = envvalue.lower()
                            if envvalue in ("0", "off", "no", "false"):
                                envvalue = False
                            elif envvalue in ("1", "yes", "on", "true"):
                                envvalue = True
                            else:
                                raise ValueError("invalid boolean value: %s%s=%s" % (PREFIX, symbol, envvalue))
                        else:
                            envvalue = valuetype(envvalue)  # just cast the value to the appropriate type
                    setattr(self, symbol, envvalue)

    def asDict(self):
        """returns the current config as a regular dictionary"""
        result = {}
        for item in self.__slots__:
            result[item] = getattr(self, item)
        return result

    def copy(self):
        """returns an independent copy of this configuration"""
        other = Configuration.__new__(Configuration)
        for item in self.__slots__:
            setattr(other, item, getattr(self, item))
        return other

    def dump(self):
        # easy config diagnostics
        config = self.asDict()
        config["LOGFILE"] = os.environ.get("REMOTEMATH_LOGFILE")
        config["LOGLEVEL"] = os.environ.get("REMOTEMATH_LOGLEVEL")
        result = ["remotemath version: %s" % remotemath.constants.VERSION,
                  "Pyro version: %s" % Pyro4.__version__,
                  "serpent version: %s" % serpent.__version__,
                  "Python version: %s %s (%s, %s)" % (platform.python_implementation(), platform.python_version(),
                                                      platform.system(), os.name),
                  "Currently active configuration settings:"]
        for n, v in sorted(config.items()):
            result.append("%s = %s" % (n, v))
        return "\n".join(result)


config = Configuration()


def configuration_dump():
    print(Configuration().dump())


if __name__ == "__main__":
    configuration_dump()
