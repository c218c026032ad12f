#!/usr/bin/env python3
"""
CDK Application entry point.

Deploy with: cdk deploy

Requires the package to be installed first: pip install -e .
"""

from chapter3_infra.app import main


if __name__ == "__main__":
    main()
