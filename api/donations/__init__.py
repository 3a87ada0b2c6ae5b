"""
Donations: submission, received history, admin status management and progress math.
"""
