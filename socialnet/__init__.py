"""
socialnet: backend de red social (usuarios, posts, comentarios, follows y likes).
"""
