"""
Tests for the math client, against a running math server.

remotemath - publish a math object with Pyro.
"""

import io
import unittest
import contextlib
import Pyro4
import Pyro4.errors
import remotemath.client
from remotemath.client import connect
from remotemath.mathservice import IRemoteMath
from remotemath.server import startup
from testsupport import ServeThread, NameServerTestCase


@Pyro4.expose
class UnfinishedMath(IRemoteMath):
    def add(self, a, b):
        return super(UnfinishedMath, self).add(a, b)


class ClientTests(NameServerTestCase):
    def setUp(self):
        super(ClientTests, self).setUp()
        self.server = startup(self.config)
        self.serving = ServeThread(self.server)
        self.serving.start()

    def tearDown(self):
        self.server.shutdown()
        self.serving.join(5)
        super(ClientTests, self).tearDown()

    def runMain(self, args):
        out, err = io.StringIO(), io.StringIO()
        nsargs = ["-n", self.nsUri.host, "-P", str(self.nsUri.port)]
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            exitcode = remotemath.client.main(nsargs + args)
        return exitcode, out.getvalue(), err.getvalue()

    def testConnect(self):
        with connect(host=self.nsUri.host, port=self.nsUri.port) as math:
            self.assertEqual(10, math.add(4, 6))
            self.assertEqual(24, math.multiply(4, 6))
            self.assertEqual(2.5, math.divide(5, 2))
            self.assertEqual(3, math.computations())

    def testConnectUnknownName(self):
        with connect("no.such.math", self.nsUri.host, self.nsUri.port) as math:
            with self.assertRaises(Pyro4.errors.NamingError):
                math.add(1, 2)

    def testOperations(self):
        self.assertEqual((0, "7\n", ""), self.runMain(["add", "3", "4"]))
        self.assertEqual((0, "-1\n", ""), self.runMain(["subtract", "3", "4"]))
        self.assertEqual((0, "1.5\n", ""), self.runMain(["multiply", "3", "0.5"]))
        self.assertEqual((0, "0.75\n", ""), self.runMain(["divide", "3", "4"]))
        self.assertEqual((0, "4\n", ""), self.runMain(["computations"]))

    def testRemoteError(self):
        exitcode, out, err = self.runMain(["divide", "1", "0"])
        self.assertEqual(1, exitcode)
        self.assertEqual("", out)
        self.assertIn("ZeroDivisionError", err)

    def testUnknownName(self):
        exitcode, out, err = self.runMain(["-o", "no.such.math", "add", "1", "2"])
        self.assertEqual(1, exitcode)
        self.assertIn("NamingError", err)

    def testUsageErrors(self):
        for args in ([], ["power", "2", "3"], ["add", "1"], ["add", "one", "two"], ["computations", "1"]):
            with self.assertRaises(SystemExit) as cm:
                self.runMain(args)
            self.assertEqual(2, cm.exception.code)


class UnfinishedImplementationTests(NameServerTestCase):
    def setUp(self):
        super(UnfinishedImplementationTests, self).setUp()
        self.server = startup(self.config, factory=UnfinishedMath)
        self.serving = ServeThread(self.server)
        self.serving.start()

    def tearDown(self):
        self.server.shutdown()
        self.serving.join(5)
        super(UnfinishedImplementationTests, self).tearDown()

    def testAnyRemoteError(self):
        out, err = io.StringIO(), io.StringIO()
        nsargs = ["-n", self.nsUri.host, "-P", str(self.nsUri.port)]
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            exitcode = remotemath.client.main(nsargs + ["add", "1", "2"])
        self.assertEqual(1, exitcode)
        self.assertEqual("", out.getvalue())
        self.assertIn("NotImplementedError", err.getvalue())


if __name__ == "__main__":
    unittest.main()
