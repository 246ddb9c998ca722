#!/usr/bin/env python
#
# This demo application serves the course library api with demo data
#
# run:
# $ python examples/demo_app.py [HOST] [PORT]
#
# the swagger ui is available on http://HOST:PORT/api/docs
#
import sys
from courselib import create_app

if __name__ == "__main__":
    HOST = sys.argv[1] if len(sys.argv) > 1 else "127.0.0.1"
    PORT = int(sys.argv[2]) if len(sys.argv) > 2 else 5000

    app = create_app({"SQLALCHEMY_DATABASE_URI": "sqlite:///courselib_demo.sqlite", "DEBUG": True}, seed=True)
    print(f"Starting API: http://{HOST}:{PORT}/api/authors")
    app.run(host=HOST, port=PORT)
