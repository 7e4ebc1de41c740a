"""Decode an INI document in 3 lines — zero config, zero deps."""

from streamini import loads

values = loads('[remote "origin"]\nurl = https://example.com/repo.git\nprune')
print(values)
