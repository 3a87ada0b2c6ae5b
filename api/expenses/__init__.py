"""
Program expenses: public transparency listing and admin CRUD.
"""
