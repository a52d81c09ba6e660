"""Command line harness around the algebra."""
