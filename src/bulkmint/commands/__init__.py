"""
Commands - CLI command implementations.

Each module corresponds to a top-level CLI command:
- collection: Create a test collection and enable minting
- submit:     Mint or burn NFTs for every item of a destinations file
- sample:     Write random destination addresses
"""
