"""
productos: data access for the productos catalog table.
"""
