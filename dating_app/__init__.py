"""Dating App Backend"""
