"""
ShipStation rates calculator: file, HTTP and dashboard front-ends over the
shipping_metrics core.
"""
