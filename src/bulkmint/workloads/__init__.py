"""
Workloads - NFT collection transactions and their report lines.

- module:     Move module / identifier resolution
- events:     Single-event lookup and payload decoding
- builders:   Mint and burn transaction builders
- collection: Test collection bootstrap (create + enable minting)
- work:       Work-item files
- submit:     Sequential submission driver
"""
