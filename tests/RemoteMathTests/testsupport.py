"""
Support code for the test suite.
Runs a real Pyro name server in a background thread for the tests that need one.

remotemath - publish a math object with Pyro.
"""

import time
import threading
import unittest
import Pyro4
import Pyro4.naming
import Pyro4.socketutil
from Pyro4.errors import CommunicationError
from remotemath.configuration import Configuration


__all__ = ["makeConfig", "unusedPort", "NSLoopThread", "ServeThread", "NameServerTestCase"]


Pyro4.config.POLLTIMEOUT = 0.1


def makeConfig(**items):
    """a configuration with the defaults, ignoring the environment"""
    config = Configuration()
    config.reset(False)
    for name, value in items.items():
        setattr(config, name, value)
    return config


def unusedPort():
    return Pyro4.socketutil.findProbablyUnusedPort()


class NSLoopThread(threading.Thread):
    def __init__(self, nameserver):
        super(NSLoopThread, self).__init__()
        self.daemon = True
        self.nameserver = nameserver
        self.running = threading.Event()
        self.running.clear()

    def run(self):
        self.running.set()
        try:
            self.nameserver.requestLoop()
        except CommunicationError:
            pass  # ignore pyro communication errors


class ServeThread(threading.Thread):
    def __init__(self, server):
        super(ServeThread, self).__init__()
        self.daemon = True
        self.server = server

    def run(self):
        self.server.serve()


class NameServerTestCase(unittest.TestCase):
    def setUp(self):
        self.nsUri, self.nameserver, _ = Pyro4.naming.startNS(host="localhost", port=0, enableBroadcast=False)
        self.nsthread = NSLoopThread(self.nameserver)
        self.nsthread.start()
        self.nsthread.running.wait()
        time.sleep(0.05)
        self.config = makeConfig(NS_HOST=self.nsUri.host, NS_PORT=self.nsUri.port)

    def tearDown(self):
        time.sleep(0.01)
        self.nameserver.shutdown()
        self.nsthread.join()

    def boundNames(self):
        """the names in the name server, except the name server's own registration"""
        with Pyro4.Proxy(self.nsUri) as ns:
            return sorted(name for name in ns.list() if name != "Pyro.NameServer")

    def lookup(self, name):
        with Pyro4.Proxy(self.nsUri) as ns:
            return ns.lookup(name)
