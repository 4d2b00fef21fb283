from kubeversion_exporter.cli import main

main()
