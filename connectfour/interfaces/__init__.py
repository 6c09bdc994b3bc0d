"""
connectfour.interfaces - User interfaces for Connect Four
"""
