"""
评价基础设施层包。
"""
