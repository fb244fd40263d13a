"""
Frontier client, frontier queue and worker lifecycle services
"""
