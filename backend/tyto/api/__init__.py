"""HTTP routers for Tyto"""
