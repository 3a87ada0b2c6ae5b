"""
Programs: public listings and detail, admin CRUD, images and goods requirements.
"""
