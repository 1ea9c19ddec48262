"""
Math server: exports a math object with Pyro and publishes it in the name server.
This is usually invoked by starting this module as a script:

  :command:`python -m remotemath.server`
  or simply: :command:`remotemath-server`

A Pyro name server must already be running (``python -m Pyro4.naming``),
unless the ``-N`` option is given to start one inside the server process.

remotemath - publish a math object with Pyro.
"""

import sys
import signal
import logging
import threading
import Pyro4
import Pyro4.errors
import Pyro4.naming
import Pyro4.socketutil
import Pyro4.util
from remotemath import constants, configuration
from remotemath.errors import (MathServerError, RegistryUnreachableError, BindRejectedError,
                               ServiceConstructionError, ExportError)
from remotemath.mathservice import RemoteMath

__all__ = ["MathServer", "startup", "locateRegistry", "main"]

log = logging.getLogger("remotemath.server")


class MathServer(object):
    """
    A math object that has been exported by a Pyro daemon and bound in the name server.
    Created by :func:`startup`. The server stays alive for as long as :meth:`serve` runs,
    which is until :meth:`shutdown` is called.
    """

    def __init__(self, daemon, service, uri, name, nameserverUri, config):
        self.daemon = daemon
        self.service = service
        self.uri = uri
        self.name = name
        self.nameserverUri = nameserverUri
        self.config = config
        self.nameserverThread = None  # name server started by this process, if any (-N)
        self._mustShutdown = threading.Event()
        self._closed = False

    @property
    def running(self):
        return not self._closed and not self._mustShutdown.is_set()

    def serve(self):
        """handle incoming calls until shutdown is requested, then release everything"""
        log.info("math server serving %s as %s", self.uri, self.name)
        try:
            self.daemon.requestLoop(loopCondition=lambda: not self._mustShutdown.is_set())
        finally:
            self.close()
        log.info("math server stopped")

    def shutdown(self):
        """signal the request loop to stop. Safe to call from other threads and signal handlers."""
        if self._mustShutdown.is_set():
            return
        self._mustShutdown.set()
        if not self._closed:
            # the request loop sits in a blocking accept; connect once so it checks the loop condition again
            try:
                Pyro4.socketutil.interruptSocket(self.daemon.sock.getsockname())
            except OSError as x:
                log.debug("could not interrupt the request loop: %s", x)

    def close(self):
        if self._closed:
            return
        self._closed = True
        self._mustShutdown.set()
        if self.config.NS_CLEANUP:
            self._unbind()
        self.daemon.unregister(self.service)
        self.daemon.close()
        if self.nameserverThread is not None:
            self.nameserverThread.shutdown()

    def _unbind(self):
        # only remove the name if it still refers to our object
        try:
            with Pyro4.Proxy(self.nameserverUri) as ns:
                if ns.lookup(self.name) == self.uri:
                    ns.remove(self.name)
                    log.info("removed %s from the name server", self.name)
        except Pyro4.errors.PyroError as x:
            log.warning("could not remove %s from the name server: %s", self.name, x)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def locateRegistry(config=None, nameserver=None):
    """
    Get a proxy for the name server. When a (host, port) tuple is given, that name server is used.
    Otherwise it is either the configured NS_HOST:NS_PORT, or whatever Pyro's own
    discovery finds if NS_BROADCAST is enabled.
    """
    config = config or configuration.config
    if nameserver is not None:
        host, port = nameserver
        return Pyro4.locateNS(host, port, broadcast=False)
    if config.NS_BROADCAST:
        return Pyro4.locateNS()
    return Pyro4.locateNS(config.NS_HOST, config.NS_PORT, broadcast=False)


def startup(config=None, factory=RemoteMath, nameserver=None):
    """
    Create the math object, export it in a new Pyro daemon and bind it in the name server
    under the configured OBJECT_NAME. Returns the :class:`MathServer`; call its ``serve`` method
    to start handling calls. Raises a :class:`remotemath.errors.MathServerError` subclass on failure.
    """
    config = config or configuration.config
    try:
        service = factory()
    except Exception as x:
        raise ServiceConstructionError("cannot construct the math object: %s" % x) from x
    try:
        daemon = Pyro4.Daemon(host=config.HOST, port=config.PORT)
    except (Pyro4.errors.PyroError, OSError) as x:
        raise ExportError("cannot create Pyro daemon on %s:%s: %s" % (config.HOST, config.PORT, x)) from x
    try:
        uri = daemon.register(service)
        log.debug("math object exported as %s", uri)
        nameserverUri = _bind(config, nameserver, service, uri)
    except Pyro4.errors.DaemonError as x:
        daemon.close()
        raise ExportError("cannot export the math object: %s" % x) from x
    except MathServerError:
        daemon.unregister(service)
        daemon.close()
        raise
    log.info("bound %s to %s in name server %s", config.OBJECT_NAME, uri, nameserverUri)
    return MathServer(daemon, service, uri, config.OBJECT_NAME, nameserverUri, config)


def _bind(config, nameserver, service, uri):
    try:
        ns = locateRegistry(config, nameserver)
    except Pyro4.errors.PyroError as x:
        raise RegistryUnreachableError("cannot locate the name server: %s" % x) from x
    with ns:
        try:
            ns.register(config.OBJECT_NAME, uri, safe=not config.NS_REBIND,
                        metadata=Pyro4.naming.type_meta(service))
        except Pyro4.errors.CommunicationError as x:
            raise RegistryUnreachableError("lost connection to the name server: %s" % x) from x
        except (Pyro4.errors.NamingError, TypeError, ValueError) as x:
            raise BindRejectedError("name server refused to bind %r: %s" % (config.OBJECT_NAME, x)) from x
        except Pyro4.errors.PyroError as x:
            raise RegistryUnreachableError("name server communication failed: %s" % x) from x
        return ns._pyroUri


class NameServer(threading.Thread):
    """Pyro's own name server, running in a background thread of the math server process."""

    def __init__(self, host, port):
        super(NameServer, self).__init__(name="remotemath-nameserver")
        self.daemon = True
        self.host = host
        self.port = port
        self.started = threading.Event()
        self.uri = self.ns_daemon = self.error = None

    def run(self):
        try:
            self.uri, self.ns_daemon, _ = Pyro4.naming.startNS(self.host, self.port, enableBroadcast=False)
        except Exception as x:
            self.error = x
            return
        finally:
            self.started.set()
        self.ns_daemon.requestLoop()

    def shutdown(self):
        if self.ns_daemon is not None:
            self.ns_daemon.shutdown()
        self.join(5)


def startNameServer(host, port):
    ns = NameServer(host, port)
    ns.start()
    ns.started.wait()
    if ns.error is not None:
        raise RegistryUnreachableError("cannot start a name server on %s:%s: %s" % (host, port, ns.error)) from ns.error
    return ns


def main(args=None, returnWithoutLooping=False):
    from optparse import OptionParser
    config = configuration.config.copy()
    parser = OptionParser(version="%prog " + constants.VERSION)
    parser.add_option("-H", "--host", default=config.HOST, help="hostname to bind server on (default=%default)")
    parser.add_option("-p", "--port", type="int", default=config.PORT, help="port to bind server on (0=random)")
    parser.add_option("-n", "--nshost", default=config.NS_HOST, help="name server host (default=%default)")
    parser.add_option("-P", "--nsport", type="int", default=config.NS_PORT, help="name server port (default=%default)")
    parser.add_option("-b", "--broadcast", action="store_true", default=config.NS_BROADCAST,
                      help="locate the name server via broadcast discovery")
    parser.add_option("-o", "--name", default=config.OBJECT_NAME, help="name to bind the math object to (default=%default)")
    parser.add_option("-r", "--rebind", action="store_true", default=config.NS_REBIND,
                      help="overwrite an existing binding of the name")
    parser.add_option("-c", "--cleanup", action="store_true", default=config.NS_CLEANUP,
                      help="remove the binding again on shutdown")
    parser.add_option("-N", "--nameserver", action="store_true", default=False, help="also start a name server")
    parser.add_option("-v", "--verbose", action="store_true", default=False, help="verbose output")
    options, args = parser.parse_args(args)

    config.HOST = options.host
    config.PORT = options.port
    config.NS_HOST = options.nshost
    config.NS_PORT = options.nsport
    config.NS_BROADCAST = options.broadcast
    config.OBJECT_NAME = options.name
    config.NS_REBIND = options.rebind
    config.NS_CLEANUP = options.cleanup

    nameserver = nsthread = None
    try:
        if options.nameserver:
            nsthread = startNameServer(config.NS_HOST, config.NS_PORT)
            nameserver = (nsthread.uri.host, nsthread.uri.port)
            if options.verbose:
                print("name server running at %s" % nsthread.uri)
        server = startup(config, nameserver=nameserver)
    except MathServerError as x:
        log.error("math server startup failed (%s): %s", type(x).__name__, x)
        sys.stderr.write("".join(Pyro4.util.getPyroTraceback()))
        sys.stderr.flush()
        if nsthread is not None:
            nsthread.shutdown()
        return x.exitcode
    server.nameserverThread = nsthread

    print(constants.READY_MESSAGE)
    if options.verbose:
        print("object name: %s" % server.name)
        print("math uri: %s" % server.uri)
        print("name server: %s" % server.nameserverUri)
    sys.stdout.flush()

    if returnWithoutLooping:
        return server  # for unit testing
    if threading.current_thread() is threading.main_thread():
        for signum in (signal.SIGINT, signal.SIGTERM):
            signal.signal(signum, lambda signum, frame: server.shutdown())
    server.serve()
    return 0


if __name__ == "__main__":
    sys.exit(main())
