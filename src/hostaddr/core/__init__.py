"""Address codecs and host composition.

- port: Port values and IANA range classification
- ipv4 / ipv6: text <-> fixed-size binary codecs
- address: family detection and dispatch over the Address union
- host / http: address + optional port composition
"""
