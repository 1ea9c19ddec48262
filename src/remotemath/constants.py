"""
Definitions of various hard coded constants.

remotemath - publish a math object with Pyro.
"""

# remotemath version
VERSION = "1.0"

# name the math object is published under in the name server
MATHSERVICE_NAME = "Compute"

# printed on stdout once the math object is bound in the name server
READY_MESSAGE = "Math server ready"
