from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
	]

	operations = [
		migrations.CreateModel(
			name='Store',
			fields=[
				('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
				('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
				('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
				('name', models.CharField(max_length=200, verbose_name='Nome')),
				('cnpj', models.CharField(max_length=18, unique=True, verbose_name='CNPJ')),
				('address', models.CharField(max_length=255, verbose_name='Endereço')),
				('phone_number', models.CharField(max_length=30, verbose_name='Telefone')),
				('contact_email', models.EmailField(max_length=254, verbose_name='E-mail')),
				('status', models.CharField(choices=[('on', 'Ativo'), ('off', 'Inativo')], default='on', max_length=3, verbose_name='Status')),
			],
			options={
				'verbose_name': 'Loja',
				'verbose_name_plural': 'Lojas',
				'ordering': ('name',),
			},
		),
	]
