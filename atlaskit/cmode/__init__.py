"""WSGI control mode for reading and changing runtime options such as the log level."""