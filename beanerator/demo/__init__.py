"""
Demo records.

Generate their beans with::

    beanerator generate beanerator.demo.coffee beanerator.demo.order
"""
